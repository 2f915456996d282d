"""Core definitions shared across pagefactory."""
