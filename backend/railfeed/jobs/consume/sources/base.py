from abc import ABC, abstractmethod


class BaseSource(ABC):
    @abstractmethod
    def consume(self, **kwargs) -> dict:
        """
        Implement receive -> decompress -> decode -> render -> ack. Return dict of run metrics.
        """
        raise NotImplementedError
