from .core import *
from .models import *
