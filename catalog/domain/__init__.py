"""Pure domain rules (slug normalization, error taxonomy) with no I/O."""
