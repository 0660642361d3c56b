"""Process start-up helpers: logging and database wiring."""
