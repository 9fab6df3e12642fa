"""Result reporters — terminal and JSON."""
