from collections import namedtuple
from contextlib import contextmanager
from datetime import datetime, timezone

from ballotbox.db.driver import RegistryDriver
from ballotbox.db.orm import Variable, Hash
from ballotbox.events import EventBus, CandidateAdded, VoterRegistered, VoteCast, VotingPhaseChanged
from ballotbox.exceptions import (
    BallotError,
    Unauthorized,
    InvalidArgument,
    AlreadyRegistered,
    VotingClosed,
    NotRegistered,
    AlreadyVoted,
    InvalidCandidate,
    RegistryExists,
    RegistryNotFound,
)
from ballotbox.logger import get_logger
from ballotbox import config

Candidate = namedtuple('Candidate', ['id', 'name', 'vote_count'])
Voter = namedtuple('Voter', ['has_voted', 'voted_candidate_id', 'is_registered'])
VotingInfo = namedtuple('VotingInfo', ['title', 'total_votes', 'candidate_count', 'is_open'])

log = get_logger('Registry')


def is_identity(value, max_len=config.MAX_KEY_SIZE):
    return isinstance(value, str) and \
           0 < len(value) <= max_len and \
           config.DELIMITER not in value and \
           config.INDEX_SEPARATOR not in value


class BallotRegistry:
    """
    Owner-administered candidate list, voter allow-list and one-vote-per-voter tally.

    A registry is a view over the state kept in a RegistryDriver under the registry's name, so any
    number of BallotRegistry objects may point at the same registry. Every mutating call takes the
    caller identity explicitly and runs as a single driver transaction: either all of its writes are
    committed or none are. Notifications are published after the commit, still under the writer lock,
    so observers see them in execution order.
    """
    def __init__(self, name, driver: RegistryDriver, events=None):
        self.name = name
        self.events = events if events is not None else EventBus()
        self._driver = driver

        self._owner = Variable(name, config.OWNER_KEY, driver=driver)
        self._submitted = Variable(name, config.TIME_KEY, driver=driver)
        self._title = Variable(name, config.TITLE_KEY, driver=driver, t=str)
        self._open = Variable(name, config.OPEN_KEY, driver=driver, t=bool, default_value=False)
        self._candidate_count = Variable(name, config.CANDIDATE_COUNT_KEY, driver=driver, t=int, default_value=0)
        self._total_votes = Variable(name, config.TOTAL_VOTES_KEY, driver=driver, t=int, default_value=0)

        self._candidates = Hash(name, config.CANDIDATES_KEY, driver=driver)
        # absent record means never registered
        self._voters = Hash(name, config.VOTERS_KEY, driver=driver)

    @classmethod
    def create(cls, name, title, caller, driver: RegistryDriver, events=None):
        if not is_identity(name, max_len=config.MAX_NAME_SIZE):
            raise InvalidArgument(argument='name', reason='registry names are 1-{} characters without "{}" or "{}"'.format(
                config.MAX_NAME_SIZE, config.DELIMITER, config.INDEX_SEPARATOR
            ))

        if not is_identity(caller):
            raise InvalidArgument(argument='caller', reason='not a valid identity')

        if not isinstance(title, str):
            raise InvalidArgument(argument='title', reason='must be text')

        registry = cls(name, driver=driver, events=events)

        with driver.transaction():
            if registry._owner.get() is not None:
                raise RegistryExists(registry=name)

            registry._owner.set(caller)
            registry._submitted.set(datetime.now(timezone.utc))
            registry._title.set(title)
            registry._open.set(False)
            registry._candidate_count.set(0)
            registry._total_votes.set(0)

        log.info('Created registry {} "{}" owned by {}'.format(name, title, caller))
        return registry

    @classmethod
    def load(cls, name, driver: RegistryDriver, events=None):
        if not is_identity(name, max_len=config.MAX_NAME_SIZE) or driver.get_owner(name) is None:
            raise RegistryNotFound(registry=name)

        return cls(name, driver=driver, events=events)

    @contextmanager
    def _mutation(self, operation):
        events = []
        with self._driver.lock:
            try:
                with self._driver.transaction():
                    yield events
            except BallotError as e:
                log.debug('{} rejected on {}: {}'.format(operation, self.name, e))
                raise

            for event in events:
                self.events.publish(event)

    def _require_owner(self, caller):
        owner = self._owner.get()

        # a registry that was never created has no owner, and nobody may write to it
        if owner is None or not is_identity(caller) or caller != owner:
            raise Unauthorized(caller=caller, registry=self.name)

    def _voter(self, address):
        if not is_identity(address):
            return None
        return self._voters[address]

    def _require_candidate(self, candidate_id):
        count = self._candidate_count.get()

        if isinstance(candidate_id, bool) or not isinstance(candidate_id, int) or not 1 <= candidate_id <= count:
            raise InvalidCandidate(candidate_id=candidate_id, candidate_count=count)

        return self._candidates[candidate_id]

    def add_candidate(self, name, caller):
        with self._mutation('add_candidate') as events:
            self._require_owner(caller)

            if not isinstance(name, str) or len(name) == 0:
                raise InvalidArgument(argument='name', reason='candidate name cannot be empty')

            candidate_id = self._candidate_count.get() + 1

            self._candidates[candidate_id] = {'name': name, 'vote_count': 0}
            self._candidate_count.set(candidate_id)

            events.append(CandidateAdded(self.name, candidate_id, name))

        log.info('{}: added candidate {} "{}"'.format(self.name, candidate_id, name))
        return candidate_id

    def register_voter(self, address, caller):
        with self._mutation('register_voter') as events:
            self._require_owner(caller)

            if not is_identity(address):
                raise InvalidArgument(argument='address', reason='not a valid identity')

            if self._voter(address) is not None:
                raise AlreadyRegistered(address=address, registry=self.name)

            self._voters[address] = {'registered': True, 'voted': False, 'candidate_id': None}

            events.append(VoterRegistered(self.name, address))

        log.info('{}: registered voter {}'.format(self.name, address))

    def set_voting_phase(self, is_open, caller):
        with self._mutation('set_voting_phase') as events:
            self._require_owner(caller)

            if not isinstance(is_open, bool):
                raise InvalidArgument(argument='is_open', reason='must be a boolean')

            self._open.set(is_open)

            events.append(VotingPhaseChanged(self.name, is_open))

        log.info('{}: voting is now {}'.format(self.name, 'open' if is_open else 'closed'))

    def vote(self, candidate_id, caller):
        with self._mutation('vote') as events:
            if not self._open.get():
                raise VotingClosed(registry=self.name)

            voter = self._voter(caller)

            if voter is None or not voter['registered']:
                raise NotRegistered(address=caller, registry=self.name)

            if voter['voted']:
                raise AlreadyVoted(address=caller, registry=self.name)

            candidate = self._require_candidate(candidate_id)

            self._voters[caller] = dict(voter, voted=True, candidate_id=candidate_id)
            self._candidates[candidate_id] = dict(candidate, vote_count=candidate['vote_count'] + 1)
            self._total_votes.set(self._total_votes.get() + 1)

            events.append(VoteCast(self.name, caller, candidate_id))

        log.info('{}: {} voted for candidate {}'.format(self.name, caller, candidate_id))

    def get_candidate(self, candidate_id):
        with self._driver.lock:
            candidate = self._require_candidate(candidate_id)
            return Candidate(candidate_id, candidate['name'], candidate['vote_count'])

    def get_all_candidates(self):
        with self._driver.lock:
            ids, names, vote_counts = [], [], []

            for candidate_id in range(1, self._candidate_count.get() + 1):
                candidate = self._candidates[candidate_id]

                ids.append(candidate_id)
                names.append(candidate['name'])
                vote_counts.append(candidate['vote_count'])

            return ids, names, vote_counts

    def get_voter(self, address):
        with self._driver.lock:
            voter = self._voter(address)

        if voter is None:
            return Voter(False, 0, False)

        return Voter(voter['voted'], voter['candidate_id'] or 0, voter['registered'])

    def get_voting_info(self):
        with self._driver.lock:
            return VotingInfo(
                self._title.get(),
                self._total_votes.get(),
                self._candidate_count.get(),
                self._open.get()
            )

    def owner(self):
        with self._driver.lock:
            return self._owner.get()

    def created(self):
        with self._driver.lock:
            return self._submitted.get()
