"""Per-activity risk profile generators: resolution, augmentation, fallback."""
