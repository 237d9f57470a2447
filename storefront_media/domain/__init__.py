"""Domain layer: media value objects and domain exceptions."""
