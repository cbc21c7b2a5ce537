"""注册中心客户端模块"""

from .base import BaseRegistryClient
from .consul_client import ConsulRegistryClient

__all__ = ['BaseRegistryClient', 'ConsulRegistryClient']
