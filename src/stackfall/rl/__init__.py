"""Command-line runners for agents playing Stackfall."""
