"""Search engine query bodies, one module per dashboard facet."""
