"""Package-manager backends, one module per manager."""
