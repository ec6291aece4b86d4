from .vocabulary import Vocabulary, Trie
from .loader import load_word_list, bundled_word_list, rank_costs, read_word_list
from .downloader import ensure_word_list, word_list_present

__all__ = [
    "Vocabulary",
    "Trie",
    "load_word_list",
    "bundled_word_list",
    "rank_costs",
    "read_word_list",
    "ensure_word_list",
    "word_list_present",
]
