import logging
import re

from core.tree_ctrl import StructureController
from trie.trie_layout import compute_trie_positions
from trie.trie_model import TrieModel

logger = logging.getLogger(__name__)


class TrieController(StructureController):
    title = "Trie"
    value_placeholder = "Word"
    view_deletable = False

    def _create_model(self):
        return TrieModel()

    def _positions(self):
        return compute_trie_positions(self.model.snapshot())

    def _apply_delete(self, word):
        if not self.model.delete(word):
            logger.info("Trie: %r is not stored", word)
            self.view.set_caption(f'"{word}" not found')
            return
        self._show_current()

    def _parse_value(self, raw: str):
        word = raw.strip()
        if not word or re.search(r"\s", word):
            raise ValueError("A word must be non-empty and contain no spaces.")
        return word

    def _describe(self) -> str:
        words = sorted(self.model.words())
        return f"{len(words)} words, {self.model.node_count} nodes\nWords: {', '.join(words) or '—'}"
