from .client import ManagerClient, deliver
from .config import Config
from .device import DeviceHandle
from .errors import (BoltError, CallTimeoutError, ClientClosedError, ConnectError,
                     RemoteError, TopologyError)
from .events import DEVICE_ADDED, DEVICE_CHANGED, DEVICE_REMOVED, PROBING_CHANGED, EventHub
from .proxy import BusTransport, RemoteProxy
from .types import AuthFlags, KeyState, Policy, Security, Status
from .version import __version__
