"""Authorization header handling."""
