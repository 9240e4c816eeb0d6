"""Host bindings for the highlight engine."""
