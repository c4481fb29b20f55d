"""Infrastructure: configuration, logging, and database wiring."""
