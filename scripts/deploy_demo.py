import sys

from ballotbox.client import BallotClient
from ballotbox.db.driver import RegistryDriver, get_driver
from ballotbox.demo import deploy_demo
from ballotbox.logger import get_logger

log = get_logger('deploy_demo')


def main(argv):
    if len(argv) < 2:
        print('usage: deploy_demo.py <owner> [voter ...]')
        return 1

    owner, voters = argv[1], argv[2:]

    client = BallotClient(signer=owner, driver=RegistryDriver(driver=get_driver()))
    registry = deploy_demo(client, voters=voters)

    info = registry.get_voting_info()
    log.info('Registry: {}'.format(registry.name))
    log.info('Owner: {}'.format(registry.owner()))
    log.info('Candidates: {}, open: {}'.format(info.candidate_count, info.is_open))
    return 0


if __name__ == '__main__':
    sys.exit(main(sys.argv))
