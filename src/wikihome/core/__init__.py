"""Core tree, naming, rendering and storage for wikihome."""
