"""Domain layer: vocabulary units, the chunk library and their reconciliation."""
