"""Servicios del Core (orquestación del flujo de envío)."""
