from .gateway import FileGateway

__all__ = ["FileGateway"]
