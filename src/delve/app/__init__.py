"""Interactive front-ends. Nothing here is imported by the core modules."""
