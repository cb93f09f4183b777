"""Domain value objects and repository protocols."""
