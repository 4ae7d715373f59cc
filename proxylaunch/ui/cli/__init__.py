"""Click command groups and the interactive selection prompt."""
