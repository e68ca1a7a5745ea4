"""Configuration, logging and exceptions shared by every mode."""
