"""Field metrics and run output."""
