"""
mail_scheduler: ciclo de vida de emails agendados, auditoría y
configuración SMTP saliente.
"""

__version__ = "0.1.0"
