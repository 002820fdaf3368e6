"""CLI module for DanuuBot."""
