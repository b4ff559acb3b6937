from ballotbox.db.driver import RegistryDriver
from ballotbox import config


class Datum:
    def __init__(self, registry, name, driver: RegistryDriver):
        self._driver = driver
        self._key = self._driver.make_key(registry, name)


class Variable(Datum):
    def __init__(self, registry, name, driver: RegistryDriver, t=None, default_value=None):
        self._type = None
        self._default_value = default_value

        if isinstance(t, type):
            self._type = t

        super().__init__(registry, name, driver=driver)

    def set(self, value):
        if self._type is not None:
            assert isinstance(value, self._type), 'Wrong type passed to variable! Expected {}, got {}.'.format(
                self._type,
                type(value)
            )

        self._driver.set(self._key, value)

    def get(self):
        value = self._driver.get(self._key)
        if value is None:
            return self._default_value
        return value


class Hash(Datum):
    """
    Records keyed by a single scalar, such as a candidate id or a voter address.

    Stored under <registry>.<name>:<key>. Callers validate keys before reaching here; the asserts
    only guard the key layout.
    """
    def __init__(self, registry, name, driver: RegistryDriver):
        super().__init__(registry, name, driver=driver)
        self._delimiter = config.DELIMITER

    def _validate_key(self, key):
        key = str(key)

        assert config.DELIMITER not in key, 'Illegal delimiter in key.'
        assert config.INDEX_SEPARATOR not in key, 'Illegal separator in key.'
        assert len(key) <= config.MAX_KEY_SIZE, 'Key is too long ({}). Max is {}.'.format(len(key), config.MAX_KEY_SIZE)

        return '{}{}{}'.format(self._key, self._delimiter, key)

    def __setitem__(self, key, value):
        self._driver.set(self._validate_key(key), value)

    def __getitem__(self, key):
        return self._driver.get(self._validate_key(key))
