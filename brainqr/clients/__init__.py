from brainqr.clients.generator import GeneratorClient, GeneratorError
from brainqr.clients.series_types import SeriesTypeClient

__all__ = ["GeneratorClient", "GeneratorError", "SeriesTypeClient"]
