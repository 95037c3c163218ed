from .datamuse import DatamuseClient, WordLookupError
from .relations import WORD_RELATIONS
from .resolver import WordAssociationResolver

__all__ = ["DatamuseClient", "WordLookupError", "WORD_RELATIONS", "WordAssociationResolver"]
