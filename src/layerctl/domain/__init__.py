"""Pure domain models and errors. No I/O."""
