"""Configuration, logging, metrics and component wiring."""
