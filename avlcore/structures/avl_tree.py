from typing import Any, Iterable, Iterator, List, Optional

from avlcore.structures.balance import LEAF_HEIGHT, balance, height, update_height
from avlcore.structures.node_arena import AVLNode, NodeArena


class AVLTree:
    """
    Árvore AVL (BST auto-balanceada) sobre uma arena de nós.
    Garante busca, inserção e remoção em O(log n).

    Os nós vivem na arena e são referenciados por índice; a árvore guarda
    apenas o índice da raiz. Toda mutação devolve a nova raiz da subárvore
    para o chamador, que substitui o próprio ponteiro (não há link para o pai).
    """
    DEFAULT_CAPACITY = 0

    def __init__(self, verbose: bool = False, capacity: int = DEFAULT_CAPACITY):
        self.arena = NodeArena(capacity)
        self.root: Optional[int] = None
        self.verbose = verbose

    @classmethod
    def from_keys(cls, keys: Iterable[Any], verbose: bool = False) -> "AVLTree":
        tree = cls(verbose=verbose)
        for key in keys:
            tree.insert(key)
        return tree

    # --- Operações públicas ---

    def insert(self, key: Any) -> bool:
        """
        Insere a chave e rebalanceia a árvore automaticamente.
        Retorna False se a chave já existia (nada é alterado, nem as alturas).
        """
        size_before = len(self.arena)
        self.root = self._insert_recursive(self.root, key)
        inserted = len(self.arena) > size_before
        if not inserted and self.verbose:
            print(f"[AVL INFO] Chave {key!r} duplicada, inserção ignorada.")
        return inserted

    def delete(self, key: Any) -> bool:
        """Remove a chave. Retorna False se ela não estava na árvore."""
        size_before = len(self.arena)
        self.root = self._delete_recursive(self.root, key)
        removed = len(self.arena) < size_before
        if not removed and self.verbose:
            print(f"[AVL INFO] Chave {key!r} não encontrada, remoção ignorada.")
        return removed

    def search(self, key: Any) -> Optional[AVLNode]:
        """Busca o nó com a chave em O(log n). Retorna o AVLNode ou None."""
        current = self.root
        while current is not None:
            node = self.arena[current]
            if key == node.key:
                return node
            elif key < node.key:
                current = node.left
            else:
                current = node.right
        return None

    def count(self) -> int:
        """Número de nós, contado recursivamente."""
        return self._count_recursive(self.root)

    def inorder(self) -> Iterator[Any]:
        """Gera as chaves em ordem crescente (esquerda, nó, direita)."""
        return self._in_order(self.root)

    def find_min(self, index: Optional[int] = None) -> Optional[AVLNode]:
        """Menor nó da subárvore em `index` (árvore inteira por padrão)."""
        if index is None:
            index = self.root
        if index is None:
            return None
        return self.arena[self._min_index(index)]

    def find_max(self, index: Optional[int] = None) -> Optional[AVLNode]:
        """Maior nó da subárvore em `index` (árvore inteira por padrão)."""
        if index is None:
            index = self.root
        if index is None:
            return None
        current = index
        while self.arena[current].right is not None:
            current = self.arena[current].right
        return self.arena[current]

    def get_all_keys(self) -> List[Any]:
        """Retorna todas as chaves (in-order traversal) para debug."""
        return list(self.inorder())

    def clear(self):
        self.root = None
        self.arena.clear()

    @property
    def height(self) -> int:
        return height(self.arena, self.root)

    def node(self, index: Optional[int]) -> Optional[AVLNode]:
        """Resolve um índice da arena (None para subárvore vazia)."""
        if index is None:
            return None
        return self.arena[index]

    # --- Inserção ---

    def _insert_recursive(self, index: Optional[int], key: Any) -> int:
        # 1. Inserção normal de BST
        if index is None:
            return self.arena.allocate(key, LEAF_HEIGHT)

        node = self.arena[index]
        if key < node.key:
            node.left = self._insert_recursive(node.left, key)
        elif key > node.key:
            node.right = self._insert_recursive(node.right, key)
        else:
            # Chaves duplicadas não são permitidas
            return index

        # 2. Atualizar altura do nó ancestral
        update_height(self.arena, index)

        # 3. Verificar desequilíbrio e aplicar rotações
        return self._rebalance_after_insert(index, key)

    def _rebalance_after_insert(self, index: int, key: Any) -> int:
        """Escolhe o caso comparando a chave inserida com a chave do filho."""
        node = self.arena[index]
        factor = balance(self.arena, index)

        # Caso 1 - Rotação à Direita (Left-Left)
        if factor > 1 and key < self.arena[node.left].key:
            self._log_case("LL", "inserção", node.key)
            return self._rotate_right(index)

        # Caso 2 - Rotação à Esquerda (Right-Right)
        if factor < -1 and key > self.arena[node.right].key:
            self._log_case("RR", "inserção", node.key)
            return self._rotate_left(index)

        # Caso 3 - Rotação Dupla à Direita (Left-Right)
        if factor > 1 and key > self.arena[node.left].key:
            self._log_case("LR", "inserção", node.key)
            node.left = self._rotate_left(node.left)
            return self._rotate_right(index)

        # Caso 4 - Rotação Dupla à Esquerda (Right-Left)
        if factor < -1 and key < self.arena[node.right].key:
            self._log_case("RL", "inserção", node.key)
            node.right = self._rotate_right(node.right)
            return self._rotate_left(index)

        return index

    # --- Remoção ---

    def _delete_recursive(self, index: Optional[int], key: Any) -> Optional[int]:
        if index is None:
            return None

        node = self.arena[index]
        if key < node.key:
            node.left = self._delete_recursive(node.left, key)
        elif key > node.key:
            node.right = self._delete_recursive(node.right, key)
        else:
            # Nó com zero ou um filho: o filho (ou None) assume o lugar
            if node.left is None or node.right is None:
                child = node.left if node.left is not None else node.right
                self.arena.release(index)
                return child

            # Nó com dois filhos: copia o sucessor in-order e o remove da direita
            successor = self.find_min(node.right)
            node.key = successor.key
            node.right = self._delete_recursive(node.right, successor.key)

        update_height(self.arena, index)
        return self._rebalance_after_delete(index)

    def _rebalance_after_delete(self, index: int) -> int:
        """
        Sem chave inserida para comparar, o caso é decidido pelo sinal do
        fator de balanceamento do filho mais alto.
        """
        node = self.arena[index]
        factor = balance(self.arena, index)

        if factor > 1:
            if balance(self.arena, node.left) >= 0:
                self._log_case("LL", "remoção", node.key)
                return self._rotate_right(index)
            self._log_case("LR", "remoção", node.key)
            node.left = self._rotate_left(node.left)
            return self._rotate_right(index)

        if factor < -1:
            if balance(self.arena, node.right) <= 0:
                self._log_case("RR", "remoção", node.key)
                return self._rotate_left(index)
            self._log_case("RL", "remoção", node.key)
            node.right = self._rotate_right(node.right)
            return self._rotate_left(index)

        return index

    # --- Métodos Auxiliares e Rotações ---

    def _rotate_left(self, x_index: int) -> int:
        """
        Realiza rotação simples à esquerda.
        Usada quando o peso está na direita (Right-Right).
        """
        x = self.arena[x_index]
        y_index = x.right
        y = self.arena[y_index]

        # Rotação
        x.right = y.left
        y.left = x_index

        # Atualiza alturas (filho antes do pai)
        update_height(self.arena, x_index)
        update_height(self.arena, y_index)

        return y_index

    def _rotate_right(self, y_index: int) -> int:
        """
        Realiza rotação simples à direita.
        Usada quando o peso está na esquerda (Left-Left).
        """
        y = self.arena[y_index]
        x_index = y.left
        x = self.arena[x_index]

        y.left = x.right
        x.right = y_index

        update_height(self.arena, y_index)
        update_height(self.arena, x_index)

        return x_index

    def _min_index(self, index: int) -> int:
        current = index
        while self.arena[current].left is not None:
            current = self.arena[current].left
        return current

    def _count_recursive(self, index: Optional[int]) -> int:
        if index is None:
            return 0
        node = self.arena[index]
        return 1 + self._count_recursive(node.left) + self._count_recursive(node.right)

    def _in_order(self, index: Optional[int]) -> Iterator[Any]:
        if index is not None:
            node = self.arena[index]
            yield from self._in_order(node.left)
            yield node.key
            yield from self._in_order(node.right)

    def _log_case(self, case: str, path: str, pivot: Any):
        if self.verbose:
            print(f"[AVL INFO] Caso {case} ({path}) no nó {pivot!r}")

    def __len__(self):
        return len(self.arena)

    def __contains__(self, key: Any) -> bool:
        return self.search(key) is not None

    def __iter__(self) -> Iterator[Any]:
        return self.inorder()

    def __repr__(self):
        return f"AVLTree(size={len(self)}, height={self.height}, keys={self.get_all_keys()})"
