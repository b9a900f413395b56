"""External service clients for communicating with external systems"""

from .vision_gateway_client import VisionGatewayClient

__all__ = ["VisionGatewayClient"]
