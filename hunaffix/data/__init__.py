from . import flags, aff, dic
