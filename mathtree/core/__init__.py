"""Configuration, logging and errors shared by the mathtree packages."""
