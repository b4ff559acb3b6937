from functools import partial

from ballotbox.db.driver import RegistryDriver
from ballotbox.events import EventBus
from ballotbox.exceptions import RegistryNotFound
from ballotbox.registry import BallotRegistry

MUTATING_FUNCTIONS = ('add_candidate', 'register_voter', 'set_voting_phase', 'vote')


class RegistryProxy:
    def __init__(self, registry: BallotRegistry, signer):
        self.registry = registry
        self.name = registry.name
        self.signer = signer

        # each mutating function is a partial that allows the signer to be overridden per call
        for func in MUTATING_FUNCTIONS:
            setattr(self, func, partial(self._signed_call, func=func, signer=self.signer))

    def _signed_call(self, *args, func, signer, **kwargs):
        return getattr(self.registry, func)(*args, caller=signer, **kwargs)

    def __getattr__(self, item):
        # reads pass straight through to the registry
        return getattr(self.registry, item)


class BallotClient:
    def __init__(self, signer='sys', driver=None, events=None):
        self.raw_driver = driver if driver is not None else RegistryDriver()
        self.signer = signer
        self.events = events if events is not None else EventBus()

    def flush(self):
        self.raw_driver.flush()

    def subscribe(self, observer):
        return self.events.subscribe(observer)

    def create(self, name, title, signer=None):
        signer = signer or self.signer

        registry = BallotRegistry.create(name=name,
                                         title=title,
                                         caller=signer,
                                         driver=self.raw_driver,
                                         events=self.events)

        return RegistryProxy(registry, signer=signer)

    # Returns a proxy which signs every mutating call as the given signer
    def get_registry(self, name, signer=None):
        try:
            registry = BallotRegistry.load(name, driver=self.raw_driver, events=self.events)
        except RegistryNotFound:
            return None

        return RegistryProxy(registry, signer=signer or self.signer)

    def get_registries(self):
        return self.raw_driver.get_registries()
