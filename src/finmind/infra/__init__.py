"""Storage infrastructure: engine wiring and SQLModel repositories."""
