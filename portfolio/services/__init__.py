"""Domain services for the portfolio site."""
