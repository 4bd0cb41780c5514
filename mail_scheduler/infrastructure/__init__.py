"""Infraestructura: DB, repositorios y clientes externos (auth, SMTP)."""
