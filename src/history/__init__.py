"""Generation history with pluggable persistence."""
