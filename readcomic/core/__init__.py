from .network import Network, Request, Response, Url
from .settings import AppSettings
from . import utils
