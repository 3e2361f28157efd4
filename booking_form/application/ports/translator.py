from abc import ABC, abstractmethod


class TranslatorPort(ABC):
    @abstractmethod
    def t(self, key: str, **params: object) -> str:
        """Return the localised message for `key`, falling back to the key itself."""
        raise NotImplementedError
