"""Text exporters for constructed graphs."""
