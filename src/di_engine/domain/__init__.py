"""Domain layer: keys, bindings, caching and the resolution algorithm."""
