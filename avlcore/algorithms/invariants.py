"""
Verificadores das invariantes da Árvore AVL.

- I1 (ordem): chaves à esquerda < chave do nó < chaves à direita.
- I2 (altura): altura(nó) = 1 + max(altura(esq), altura(dir)).
- I3 (balanceamento): |altura(esq) - altura(dir)| <= 1 em todo nó.

Nenhum verificador altera a árvore; todos devolvem bool.
"""
from dataclasses import dataclass
from typing import Any, Optional

from avlcore.structures.avl_tree import AVLTree
from avlcore.structures.balance import balance, height


def is_valid_bst(tree: AVLTree, lower_bound: Any = None, upper_bound: Any = None) -> bool:
    """Checa I1. Limites exclusivos; None significa sem limite."""
    return _valid_bst_recursive(tree, tree.root, lower_bound, upper_bound)


def _valid_bst_recursive(tree: AVLTree, index: Optional[int], lower: Any, upper: Any) -> bool:
    if index is None:
        return True
    node = tree.arena[index]
    if lower is not None and node.key <= lower:
        return False
    if upper is not None and node.key >= upper:
        return False
    return (_valid_bst_recursive(tree, node.left, lower, node.key) and
            _valid_bst_recursive(tree, node.right, node.key, upper))


def is_balanced(tree: AVLTree) -> bool:
    """Checa I3 em todos os nós."""
    return _balanced_recursive(tree, tree.root)


def _balanced_recursive(tree: AVLTree, index: Optional[int]) -> bool:
    if index is None:
        return True
    factor = balance(tree.arena, index)
    if factor > 1 or factor < -1:
        return False
    node = tree.arena[index]
    return _balanced_recursive(tree, node.left) and _balanced_recursive(tree, node.right)


def is_height_consistent(tree: AVLTree) -> bool:
    """Checa I2: a altura em cache de cada nó bate com a dos filhos."""
    return _height_recursive(tree, tree.root)


def _height_recursive(tree: AVLTree, index: Optional[int]) -> bool:
    if index is None:
        return True
    node = tree.arena[index]
    expected = 1 + max(height(tree.arena, node.left), height(tree.arena, node.right))
    if node.height != expected:
        return False
    return _height_recursive(tree, node.left) and _height_recursive(tree, node.right)


def is_sorted_inorder(tree: AVLTree) -> bool:
    """O percurso in-order deve ser estritamente crescente."""
    previous = None
    first = True
    for key in tree.inorder():
        if not first and not previous < key:
            return False
        previous = key
        first = False
    return True


@dataclass
class InvariantReport:
    valid_bst: bool
    balanced: bool
    height_consistent: bool
    sorted_inorder: bool
    count: int
    height: int

    @property
    def ok(self) -> bool:
        return self.valid_bst and self.balanced and self.height_consistent and self.sorted_inorder

    def __str__(self):
        lines = [f"Árvore com {self.count} nós, altura {self.height}"]
        checks = [
            ("Ordem (BST)", self.valid_bst),
            ("Balanceamento", self.balanced),
            ("Altura em cache", self.height_consistent),
            ("In-order crescente", self.sorted_inorder),
        ]
        for name, passed in checks:
            status = "✓ PASSOU" if passed else "✗ FALHOU"
            lines.append(f"  {name:20s}: {status}")
        return "\n".join(lines)


def validate_tree(tree: AVLTree, lower_bound: Any = None, upper_bound: Any = None) -> InvariantReport:
    """Executa todos os verificadores e agrega o resultado."""
    return InvariantReport(
        valid_bst=is_valid_bst(tree, lower_bound, upper_bound),
        balanced=is_balanced(tree),
        height_consistent=is_height_consistent(tree),
        sorted_inorder=is_sorted_inorder(tree),
        count=tree.count(),
        height=tree.height,
    )
