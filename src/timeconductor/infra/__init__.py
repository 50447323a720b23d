"""Infrastructure layer: settings, logging and exceptions."""
