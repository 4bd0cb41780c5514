"""Crosscutting: configuración, logging estructurado y excepciones tipadas."""
