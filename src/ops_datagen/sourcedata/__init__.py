"""Built-in label sets used as configuration defaults."""
