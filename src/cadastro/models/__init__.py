r"""
Single import point for every ORM model, so `Base.metadata` is complete once this
package is imported:

    from cadastro.models import Associado, Dependente
"""

from .associado import Associado
from .dependente import Dependente
from .cartao_associado import CartaoAssociado
from .atendimento import Atendimento
from .agendamento import Agendamento
from .contato import Contato
from .historico import Historico
from .negociacao import Negociacao
from .parcela import Parcela

__all__ = [
    "Associado",
    "Dependente",
    "CartaoAssociado",
    "Atendimento",
    "Agendamento",
    "Contato",
    "Historico",
    "Negociacao",
    "Parcela",
]
