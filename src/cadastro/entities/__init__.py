from .registry import EntityDescriptor, REGISTRY, get_descriptor

__all__ = ["EntityDescriptor", "REGISTRY", "get_descriptor"]
