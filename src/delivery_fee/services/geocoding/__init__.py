from .cep_client import ViaCepClient, normalize_cep
from .nominatim_client import NominatimClient, format_address

__all__ = ["NominatimClient", "ViaCepClient", "format_address", "normalize_cep"]
