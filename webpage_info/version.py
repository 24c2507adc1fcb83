__version__ = "1.0.0"

HOMEPAGE = "https://pypi.org/project/webpage-info/"
