from .core import Network
from .request import Request, Url
from .response import Response
