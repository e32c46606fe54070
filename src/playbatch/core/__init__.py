"""Work item model and runtime configuration."""
