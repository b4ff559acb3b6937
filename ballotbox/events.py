from collections import namedtuple

from ballotbox.logger import get_logger

CandidateAdded = namedtuple('CandidateAdded', ['registry', 'candidate_id', 'name'])
VoterRegistered = namedtuple('VoterRegistered', ['registry', 'address'])
VoteCast = namedtuple('VoteCast', ['registry', 'address', 'candidate_id'])
VotingPhaseChanged = namedtuple('VotingPhaseChanged', ['registry', 'is_open'])


class EventBus:
    """
    Fans registry notifications out to observers in the order they subscribed.

    Observers are plain callables taking a single event. Delivery is synchronous and
    fire-and-forget: nothing is queued, replayed or deduplicated.
    """
    def __init__(self):
        self.observers = []
        self.log = get_logger('EventBus')

    def subscribe(self, observer):
        self.observers.append(observer)

        def unsubscribe():
            if observer in self.observers:
                self.observers.remove(observer)

        return unsubscribe

    def publish(self, event):
        for observer in list(self.observers):
            try:
                observer(event)
            except Exception:
                # State is already committed by the time observers run
                self.log.exception('Observer {!r} failed on {!r}'.format(observer, event))
