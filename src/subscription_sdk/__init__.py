__all__ = [
    # Client
    "SubscriptionManagerClient",
    "CLOCK_ADDRESS",
    # Config
    "ClientConfig",
    "NETWORKS",
    # Models
    "Tier",
    "FREE",
    "TIER1",
    "TIER2",
    "PRICE_TIER1",
    "PRICE_TIER2",
    "TIER_PRICES",
    "tier_cost",
    "ManagerObject",
    "SubscriptionRecord",
    "SubscriptionStatus",
    "SubscriptionEvent",
    "EventPage",
    # Chain
    "SuiRpcClient",
    "RpcResult",
    "Ok",
    "NotFound",
    "Failed",
    "TransactionBlock",
    # Errors
    "SubscriptionSdkError",
    "ConfigurationError",
    "ManagerObjectError",
    "StructuralError",
    "RpcError",
    # Utils
    "normalize_sui_address",
]

from .chain.rpc import Failed, NotFound, Ok, RpcResult, SuiRpcClient
from .chain.tx import TransactionBlock
from .client import CLOCK_ADDRESS, SubscriptionManagerClient
from .config import NETWORKS, ClientConfig
from .errors import (
    ConfigurationError,
    ManagerObjectError,
    RpcError,
    StructuralError,
    SubscriptionSdkError,
)
from .models import (
    FREE,
    PRICE_TIER1,
    PRICE_TIER2,
    TIER1,
    TIER2,
    TIER_PRICES,
    EventPage,
    ManagerObject,
    SubscriptionEvent,
    SubscriptionRecord,
    SubscriptionStatus,
    Tier,
    tier_cost,
)
from .utils import normalize_sui_address
