"""Camada de domínio: registros, relógio e contratos."""
