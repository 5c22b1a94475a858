from typing import Any, List, Optional

# Convenção de altura: subárvore vazia = 0, folha = 1
EMPTY_HEIGHT = 0
LEAF_HEIGHT = 1


class AVLNode:
    """
    Nó interno da Árvore AVL.
    Armazena a chave, os índices dos filhos dentro da arena e a altura.
    """
    def __init__(self, key: Any, height: int = LEAF_HEIGHT):
        self.key = key
        self.left: Optional[int] = None     # Índice do filho esquerdo na arena
        self.right: Optional[int] = None    # Índice do filho direito na arena
        self.height = height

    def __repr__(self):
        return f"AVLNode(key={self.key!r}, h={self.height}, left={self.left}, right={self.right})"


class NodeArena:
    """
    Armazenamento contíguo dos nós da árvore.
    Cada nó é identificado por um índice inteiro estável; os slots liberados
    vão para uma free-list e são reaproveitados nas próximas alocações.
    """
    def __init__(self, initial_capacity: int = 0):
        if initial_capacity < 0:
            raise ValueError("A capacidade inicial da arena não pode ser negativa.")

        self.slots: List[Optional[AVLNode]] = [None] * initial_capacity
        # Slots pré-reservados entram na free-list em ordem crescente de uso
        self.free_list: List[int] = list(range(initial_capacity - 1, -1, -1))
        self.size = 0

    def allocate(self, key: Any, height: int = LEAF_HEIGHT) -> int:
        """Cria um nó folha e retorna seu índice. O(1)."""
        node = AVLNode(key, height)
        if self.free_list:
            index = self.free_list.pop()
            self.slots[index] = node
        else:
            index = len(self.slots)
            self.slots.append(node)
        self.size += 1
        return index

    def release(self, index: int):
        """Devolve o slot à free-list. O nó deixa de ser acessível."""
        if not self.is_live(index):
            raise ValueError(f"Slot {index} não está ocupado.")
        self.slots[index] = None
        self.free_list.append(index)
        self.size -= 1

    def get(self, index: int) -> AVLNode:
        if not self.is_live(index):
            raise IndexError(f"Slot {index} vazio ou fora da arena.")
        return self.slots[index]

    def is_live(self, index: int) -> bool:
        return 0 <= index < len(self.slots) and self.slots[index] is not None

    def clear(self):
        self.slots = []
        self.free_list = []
        self.size = 0

    @property
    def capacity(self) -> int:
        return len(self.slots)

    def __getitem__(self, index: int) -> AVLNode:
        return self.get(index)

    def __len__(self):
        return self.size

    def __repr__(self):
        return f"NodeArena(live={self.size}/{self.capacity}, free={len(self.free_list)})"
