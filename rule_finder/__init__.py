"""Report enabled, available, unused and deprecated lint rules."""
