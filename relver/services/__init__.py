"""Service layer: release logic built on the git and output layers."""
