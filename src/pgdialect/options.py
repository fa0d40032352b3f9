from dataclasses import dataclass

from pgdialect.strategy import get_available_dialects, is_supported_dialect
from pgdialect.utils import normalize_dialect_name

from libb import ConfigOptions

__all__ = ['DialectOptions']


@dataclass
class DialectOptions(ConfigOptions):
    """Options

    supported driver names: `postgres` (alias `postgresql`)

    Type inference options:
    - default_size: Size given to fields without a SIZE tag (default: 255)
    - max_varchar_size: Exclusive upper bound for varchar(n) (default: 65532)
    - composite_type_name: Runtime type name stored as hstore (default: Hstore)

    Introspection options:
    - strict_probes: Raise IntrospectionError instead of answering False
      when a catalog probe fails (default: False)
    """
    drivername: str = 'postgres'
    hostname: str = None
    username: str = None
    password: str = None
    database: str = None
    port: int = 0
    timeout: int = 0
    default_size: int = 255
    max_varchar_size: int = 65532
    composite_type_name: str = 'Hstore'
    strict_probes: bool = False

    def __post_init__(self):
        self.drivername = normalize_dialect_name(self.drivername)
        if not is_supported_dialect(self.drivername):
            available = get_available_dialects()
            raise ValueError(f'drivername must be one of: {available}')
        if self.default_size < 1:
            raise ValueError('default_size must be positive')
        if self.max_varchar_size < 2:
            raise ValueError('max_varchar_size must be at least 2')
