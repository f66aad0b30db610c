from .waste import WasteGateway
from .redemption import RedemptionGateway
from .admin import AdminQuery

__all__ = ['WasteGateway', 'RedemptionGateway', 'AdminQuery']
