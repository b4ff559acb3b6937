from ballotbox.client import BallotClient
from ballotbox.logger import get_logger

DEMO_NAME = 'presidential2024'
DEMO_TITLE = 'Presidential Election 2024'
DEMO_CANDIDATES = ['Alice Johnson', 'Bob Smith', 'Charlie Brown']

log = get_logger('Demo')


def deploy_demo(client: BallotClient, voters, name=DEMO_NAME, title=DEMO_TITLE, candidates=DEMO_CANDIDATES):
    """Create a registry signed by the client's signer, seed it and open voting."""
    registry = client.create(name, title)
    log.info('Deployed registry {} owned by {}'.format(name, client.signer))

    for candidate in candidates:
        registry.add_candidate(candidate)
        log.info('Added candidate: {}'.format(candidate))

    for voter in voters:
        registry.register_voter(voter)
        log.info('Registered voter: {}'.format(voter))

    registry.set_voting_phase(True)
    log.info('Voting is now open!')

    return registry
