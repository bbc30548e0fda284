"""Pure utility helpers shared by modules."""
