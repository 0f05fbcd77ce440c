"""Trie for longest-prefix matching of reference names.

Legacy references may appear without a terminating `;` and directly followed
by more name characters (`&copyright` decodes `&copy` and keeps `right`), so the
scanner needs the longest known name that is a prefix of the text after `&`.
The trie answers that in one forward pass without slicing the input.
"""


class TrieNode:
    """Single node in the trie tree."""
    __slots__ = ("children", "value", "is_terminal")

    def __init__(self):
        self.children = {}  # char -> TrieNode
        self.value = None
        self.is_terminal = False


class Trie:
    """Maps reference names to decoded text.

    Usage:
        trie = Trie({"not": "¬", "copy": "©"})
        trie.longest_prefix("&copyright", 1)  # (5, "©")
    """

    __slots__ = ("root",)

    def __init__(self, names):
        self.root = TrieNode()
        for name, value in names.items():
            self._insert(name, value)

    def _insert(self, name, value):
        node = self.root
        for char in name:
            children = node.children
            if char not in children:
                children[char] = TrieNode()
            node = children[char]
        node.is_terminal = True
        node.value = value

    def longest_prefix(self, text, start=0):
        """Find the longest name that starts at `text[start]`.

        Args:
            text: the full input text
            start: offset of the first name character

        Returns:
            tuple: (end offset, decoded value), or None if no name matches
        """
        node = self.root
        match = None
        pos = start
        length = len(text)
        while pos < length:
            node = node.children.get(text[pos])
            if node is None:
                break
            pos += 1
            if node.is_terminal:
                match = (pos, node.value)
        return match
