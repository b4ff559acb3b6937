from contextlib import contextmanager
import re
import threading

import pymongo

from ballotbox.db.encoder import encode, decode
from ballotbox.exceptions import DatabaseDriverNotFound
from ballotbox.logger import get_logger
from ballotbox import config

# DB maps str to encoded str
# Driver maps str to python object
# apply() takes {key: value}, a None value deletes the key


class InMemDriver:
    def __init__(self):
        self.db = {}

    def get(self, item: str):
        return decode(self.db.get(item))

    def apply(self, writes: dict):
        # Encode everything before touching the store so a bad value changes nothing
        encoded = {k: None if v is None else encode(v) for k, v in writes.items()}

        for k, v in encoded.items():
            if v is None:
                self.db.pop(k, None)
            else:
                self.db[k] = v

    def iter(self, prefix: str):
        return [k for k in sorted(self.db.keys()) if k.startswith(prefix)]

    def keys(self):
        return sorted(self.db.keys())

    def flush(self):
        self.db.clear()


class MongoDriver:
    # conn_str see https://www.mongodb.com/docs/manual/reference/connection-string/
    def __init__(self, conn_str=config.MONGO_URL, db=config.MONGO_DB, collection=config.MONGO_COLLECTION,
                 transactions=config.MONGO_TRANSACTIONS):
        self.client = pymongo.MongoClient(conn_str)
        self.db = self.client[db][collection]
        self.db.create_index('rawKey', unique=True)

        # Multi-document transactions need a replica set or sharded cluster
        self.transactions = transactions

    def get(self, item: str):
        v = self.db.find_one({'rawKey': item})
        if v is None:
            return None

        return decode(v['value'])

    def _operations(self, writes: dict):
        ops = []
        for k, v in writes.items():
            if v is None:
                ops.append(pymongo.DeleteOne({'rawKey': k}))
            else:
                ops.append(pymongo.UpdateOne({'rawKey': k}, {'$set': {'value': encode(v)}}, upsert=True))
        return ops

    def apply(self, writes: dict):
        ops = self._operations(writes)
        if not ops:
            return

        if self.transactions:
            with self.client.start_session() as session:
                session.with_transaction(lambda s: self.db.bulk_write(ops, ordered=True, session=s))
        else:
            self.db.bulk_write(ops, ordered=True)

    def iter(self, prefix: str):
        cur = self.db.find({'rawKey': {'$regex': '^{}'.format(re.escape(prefix))}}).sort('rawKey', pymongo.ASCENDING)
        return [entry['rawKey'] for entry in cur]

    def keys(self):
        return self.iter('')

    def flush(self):
        self.db.delete_many({})


DRIVERS = {
    'memory': InMemDriver,
    'mongo': MongoDriver,
}


def get_driver(db_type=None, **kwargs):
    db_type = db_type or config.DB_TYPE

    driver = DRIVERS.get(db_type)
    if driver is None:
        raise DatabaseDriverNotFound(driver=db_type, known_drivers=list(DRIVERS.keys()))

    return driver(**kwargs)


class CacheDriver:
    def __init__(self, driver=None):
        self.pending_writes = {}
        self.driver = driver if driver is not None else get_driver()

    def get(self, key: str):
        if key in self.pending_writes:
            return self.pending_writes[key]

        return self.driver.get(key)

    def set(self, key, value):
        self.pending_writes[key] = value

    def commit(self):
        # pending_writes is only cleared once the raw driver has taken the whole batch
        self.driver.apply(dict(self.pending_writes))
        self.pending_writes.clear()

    def rollback(self):
        self.pending_writes.clear()


class RegistryDriver(CacheDriver):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.delimiter = config.INDEX_SEPARATOR
        self.lock = threading.RLock()
        self.log = get_logger('Driver')

        self._depth = 0

    def keys(self, prefix=''):
        # Pending writes shadow whatever is on disk, including pending deletes
        keys = {k for k in self.driver.iter(prefix) if k not in self.pending_writes}
        keys.update(k for k, v in self.pending_writes.items() if k.startswith(prefix) and v is not None)
        return sorted(keys)

    def make_key(self, registry, variable):
        return self.delimiter.join((registry, variable))

    def get_owner(self, name):
        return self.get(self.make_key(name, config.OWNER_KEY))

    def get_registries(self):
        suffix = self.delimiter + config.OWNER_KEY
        return [k[:-len(suffix)] for k in self.keys() if k.endswith(suffix)]

    @contextmanager
    def transaction(self):
        with self.lock:
            self._depth += 1
            try:
                yield self

                if self._depth == 1:
                    self.commit()
            except Exception:
                if self._depth == 1:
                    self.log.debug('Rolling back {} pending writes'.format(len(self.pending_writes)))
                    self.rollback()
                raise
            finally:
                self._depth -= 1

    def flush(self):
        with self.lock:
            self.driver.flush()
            self.rollback()
