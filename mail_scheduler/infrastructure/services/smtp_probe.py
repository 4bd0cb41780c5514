"""
============================================================
TARJETA CRC — infrastructure/services/smtp_probe.py
============================================================
Class: SmtpConnectionProbe

Responsibilities:
  - Implementar SmtpProbe: conectar, negociar TLS, autenticar y cerrar.
  - Puerto 465 => TLS implícito (SMTP_SSL); otro puerto => STARTTLS si
    use_tls está activo.
  - Traducir errores de smtplib/ssl/socket a un ProbeResult legible.

Collaborators:
  - smtplib / ssl (stdlib)
  - domain.services.ProbeResult
  - crosscutting.logger.logger

Constraints:
  - Nunca envía mail (no hay MAIL FROM / DATA).
  - Nunca muta configuración ni crea trabajo agendado.
  - La credencial no aparece en logs ni en el mensaje devuelto.
============================================================
"""

from __future__ import annotations

import smtplib
import ssl

from ...crosscutting.logger import logger
from ...domain.entities import DeliveryConfiguration
from ...domain.services import ProbeResult

IMPLICIT_TLS_PORT = 465
DEFAULT_PROBE_TIMEOUT_SECONDS = 10.0


class SmtpConnectionProbe:
    """Probe SMTP sin efectos laterales (connect + login + quit)."""

    def __init__(self, *, timeout_seconds: float = DEFAULT_PROBE_TIMEOUT_SECONDS):
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")
        self._timeout = timeout_seconds

    def probe(self, configuration: DeliveryConfiguration) -> ProbeResult:
        host = configuration.smtp_host
        port = configuration.smtp_port
        server: smtplib.SMTP | None = None

        try:
            server = self._connect(configuration)
            server.login(configuration.smtp_user, configuration.smtp_credential)
        except smtplib.SMTPAuthenticationError:
            return self._failed(
                configuration, "Authentication failed. Check username and password."
            )
        except smtplib.SMTPConnectError:
            return self._failed(
                configuration, f"Could not connect to {host}:{port}. Check host and port."
            )
        except smtplib.SMTPServerDisconnected:
            return self._failed(
                configuration, "Server disconnected unexpectedly. Try a different port."
            )
        except smtplib.SMTPNotSupportedError:
            return self._failed(
                configuration, "The server does not support the requested TLS mode."
            )
        except ssl.SSLError:
            return self._failed(
                configuration, "SSL/TLS error. Try toggling TLS setting or use port 465."
            )
        except TimeoutError:
            return self._failed(configuration, "Connection timed out. Check host and port.")
        except (smtplib.SMTPException, OSError) as exc:
            return self._failed(configuration, f"Connection failed: {exc}")
        finally:
            if server is not None:
                self._close(server)

        logger.info(
            "SMTP probe succeeded",
            extra={"smtp_host": host, "smtp_port": port},
        )
        return ProbeResult(success=True, message="Connection successful.")

    def _connect(self, configuration: DeliveryConfiguration) -> smtplib.SMTP:
        host = configuration.smtp_host
        port = configuration.smtp_port

        if port == IMPLICIT_TLS_PORT:
            return smtplib.SMTP_SSL(
                host, port, context=ssl.create_default_context(), timeout=self._timeout
            )

        server = smtplib.SMTP(host, port, timeout=self._timeout)
        if configuration.use_tls:
            try:
                server.starttls(context=ssl.create_default_context())
            except (smtplib.SMTPException, OSError):
                # probe() todavía no tiene el server: cerrarlo acá.
                server.close()
                raise
        return server

    @staticmethod
    def _close(server: smtplib.SMTP) -> None:
        try:
            server.quit()
        except (smtplib.SMTPException, OSError):
            server.close()

    @staticmethod
    def _failed(configuration: DeliveryConfiguration, message: str) -> ProbeResult:
        logger.warning(
            "SMTP probe failed",
            extra={
                "smtp_host": configuration.smtp_host,
                "smtp_port": configuration.smtp_port,
                "reason": message,
            },
        )
        return ProbeResult(success=False, message=message)
