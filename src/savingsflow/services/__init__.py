"""Service layer: the presentation-facing contract, aggregation and serialization."""
