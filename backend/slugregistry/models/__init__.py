from .site import Site
from .document import Document
from .data_object import DataObject
from .url_slug import UrlSlug
