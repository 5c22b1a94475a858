from typing import Optional

from avlcore.structures.node_arena import EMPTY_HEIGHT, LEAF_HEIGHT, NodeArena

# Convenção de altura reexportada junto com o oráculo de balanceamento
__all__ = ["EMPTY_HEIGHT", "LEAF_HEIGHT", "height", "balance", "update_height"]


def height(arena: NodeArena, index: Optional[int]) -> int:
    """Altura em cache do nó (nunca recalculada aqui)."""
    if index is None:
        return EMPTY_HEIGHT
    return arena[index].height


def balance(arena: NodeArena, index: Optional[int]) -> int:
    """Fator de balanceamento: altura(esquerda) - altura(direita)."""
    if index is None:
        return 0
    node = arena[index]
    return height(arena, node.left) - height(arena, node.right)


def update_height(arena: NodeArena, index: int) -> int:
    """Recalcula a altura do nó a partir das alturas em cache dos filhos."""
    node = arena[index]
    node.height = 1 + max(height(arena, node.left), height(arena, node.right))
    return node.height
