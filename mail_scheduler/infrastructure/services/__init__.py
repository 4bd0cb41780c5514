"""Adapters para servicios externos (auth hosteado, probe SMTP)."""

from .smtp_probe import SmtpConnectionProbe
from .supabase_auth import SupabaseAuthClient

__all__ = ["SmtpConnectionProbe", "SupabaseAuthClient"]
