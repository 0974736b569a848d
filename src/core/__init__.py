"""Core: dominio, contratos y orquestación (sin I/O directo)."""
