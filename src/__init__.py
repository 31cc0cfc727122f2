"""UI Tree Compiler Service."""
