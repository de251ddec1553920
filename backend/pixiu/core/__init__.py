"""Cross-cutting Flask wiring: config, logging, errors, extensions."""
