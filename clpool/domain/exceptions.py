from __future__ import annotations


class DomainError(Exception):
    """Base para erros de dominio."""


class PoolNotFoundError(DomainError):
    """Pool solicitada nao existe."""


class InvalidArgumentError(DomainError):
    """Parametros de swap invalidos (denoms, quantidades, taxa)."""


class InvalidPriceError(InvalidArgumentError):
    """Preco nao positivo."""


class TickOutOfBoundsError(DomainError):
    """Tick ou sqrt price fora do intervalo representavel."""


class PriceLimitViolationError(DomainError):
    """Limite de preco do lado errado do preco atual ou fora dos limites globais."""


class NoLiquidityError(DomainError):
    """Nao ha liquidez suficiente para completar o swap."""


class SlippageExceededError(DomainError):
    """Resultado do swap fora dos limites aceitos pelo trader."""


class ComputationError(DomainError):
    """Operacao numerica indefinida para a entrada."""


class ComputationDivergenceError(ComputationError):
    """Loop de swap excedeu o numero maximo de iteracoes."""


class TransferError(DomainError):
    """Falha ao liquidar saldos entre trader e pool."""
