"""usectl command implementations."""
