"""Timer-driven re-entry: the retry scheduler and its timer hosts."""
