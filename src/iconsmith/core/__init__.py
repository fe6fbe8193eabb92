"""Core building blocks shared by the icon font pipeline."""
