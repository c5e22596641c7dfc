"""Cloud provider SDK access."""
