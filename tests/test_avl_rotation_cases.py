import sys
import os
import io
from contextlib import redirect_stdout

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from avlcore.structures.avl_tree import AVLTree
from avlcore.algorithms.invariants import validate_tree


def shape(tree):
    """Representa a árvore como (chave, esq, dir) para comparar formatos."""
    return _shape(tree, tree.root)


def _shape(tree, index):
    if index is None:
        return None
    node = tree.node(index)
    return (node.key, _shape(tree, node.left), _shape(tree, node.right))


def heights(tree):
    return {node.key: node.height for node in tree.arena.slots if node is not None}


def test_insert_left_left():
    print("--- Caso LL (inserção): 30, 20, 10 ---")
    avl = AVLTree.from_keys([30, 20, 10])

    assert shape(avl) == (20, (10, None, None), (30, None, None))
    assert heights(avl) == {20: 2, 10: 1, 30: 1}, "Filhos devem ser folhas de altura 1"
    print(">> SUCESSO: Rotação simples à direita aplicada.")


def test_insert_left_right():
    print("--- Caso LR (inserção): 30, 10, 20 ---")
    avl = AVLTree.from_keys([30, 10, 20])

    assert shape(avl) == (20, (10, None, None), (30, None, None))
    print(">> SUCESSO: Rotação dupla esquerda-direita aplicada.")


def test_insert_right_right_then_grow():
    print("--- Caso RR (inserção): 10, 20, 30, 40 ---")
    avl = AVLTree.from_keys([10, 20, 30, 40])

    assert shape(avl) == (20, (10, None, None), (30, None, (40, None, None)))
    assert avl.height == 3
    print(">> SUCESSO: Raiz 20 com subárvore direita 30 -> 40.")


def test_insert_right_left():
    avl = AVLTree.from_keys([10, 30, 20])

    assert shape(avl) == (20, (10, None, None), (30, None, None))


def test_delete_left_left_with_balanced_child():
    # Filho esquerdo com fator 0: ainda é caso LL (balance >= 0)
    avl = AVLTree.from_keys([20, 10, 30, 5, 15])
    assert avl.delete(30) is True

    assert shape(avl) == (10, (5, None, None), (20, (15, None, None), None))
    assert validate_tree(avl).ok


def test_delete_left_left():
    avl = AVLTree.from_keys([20, 10, 30, 5])
    avl.delete(30)

    assert shape(avl) == (10, (5, None, None), (20, None, None))


def test_delete_left_right():
    avl = AVLTree.from_keys([20, 10, 30, 15])
    avl.delete(30)

    assert shape(avl) == (15, (10, None, None), (20, None, None))


def test_delete_right_right():
    avl = AVLTree.from_keys([20, 10, 30, 40])
    avl.delete(10)

    assert shape(avl) == (30, (20, None, None), (40, None, None))


def test_delete_right_right_with_balanced_child():
    avl = AVLTree.from_keys([20, 10, 30, 25, 40])
    avl.delete(10)

    assert shape(avl) == (30, (20, None, (25, None, None)), (40, None, None))
    assert validate_tree(avl).ok


def test_delete_right_left():
    avl = AVLTree.from_keys([20, 10, 30, 25])
    avl.delete(10)

    assert shape(avl) == (25, (20, None, None), (30, None, None))


def test_delete_node_with_two_children_uses_successor():
    avl = AVLTree.from_keys([50, 30, 70, 60, 80])
    avl.delete(50)

    # O sucessor in-order (60) assume a raiz
    assert avl.node(avl.root).key == 60
    assert avl.get_all_keys() == [30, 60, 70, 80]
    assert validate_tree(avl).ok


def test_delete_last_node_empties_tree():
    avl = AVLTree.from_keys([42])
    assert avl.delete(42) is True

    assert avl.root is None
    assert avl.count() == 0
    assert avl.search(42) is None


def test_verbose_logs_rotation_cases():
    out = io.StringIO()
    with redirect_stdout(out):
        avl = AVLTree.from_keys([30, 20, 10], verbose=True)
        avl.insert(20)
        avl.delete(99)
        avl.delete(30)
        avl.delete(20)

    log = out.getvalue()
    print(log)
    assert "[AVL INFO] Caso LL (inserção) no nó 30" in log
    assert "duplicada" in log
    assert "não encontrada" in log


def test_silent_by_default():
    out = io.StringIO()
    with redirect_stdout(out):
        avl = AVLTree.from_keys([1, 2, 3, 4, 5])
        avl.insert(3)
        avl.delete(1)

    assert out.getvalue() == ""


if __name__ == "__main__":
    test_insert_left_left()
    test_insert_left_right()
    test_insert_right_right_then_grow()
    test_insert_right_left()
    test_delete_left_left_with_balanced_child()
    test_delete_left_left()
    test_delete_left_right()
    test_delete_right_right()
    test_delete_right_right_with_balanced_child()
    test_delete_right_left()
    test_delete_node_with_two_children_uses_successor()
    test_delete_last_node_empties_tree()
    test_verbose_logs_rotation_cases()
    test_silent_by_default()
