from sanic import Sanic
from sanic.response import json, text
from sanic_cors import CORS

from ballotbox.client import BallotClient
from ballotbox.exceptions import (
    BallotError,
    Unauthorized,
    InvalidCandidate,
    AlreadyRegistered,
    AlreadyVoted,
    RegistryExists,
    RegistryNotFound,
)
from ballotbox.logger import get_logger
from ballotbox import config

ERROR_STATUS = {
    RegistryNotFound: 404,
    InvalidCandidate: 404,
    Unauthorized: 403,
    RegistryExists: 409,
    AlreadyRegistered: 409,
    AlreadyVoted: 409,
}

# Handlers call the registry synchronously, and each call takes the driver's threading.RLock.
# A worker serves every request from its single event loop thread, so the lock is never contended
# inside a worker and each call blocks the loop only for one in-memory or Mongo transaction.
# Workers (NUM_WORKERS) are separate processes and need the shared Mongo driver to see each other's writes.
app = Sanic('ballotbox')

CORS(app, automatic_options=True)
client = BallotClient()
log = get_logger('Webserver')


def error(message, status, kind=None):
    return json({'error': message, 'type': kind}, status=status)


@app.exception(BallotError)
async def ballot_error(request, exception):
    status = ERROR_STATUS.get(type(exception), 400)
    return error(str(exception), status, type(exception).__name__)


def payload(request, *fields):
    body = request.json
    if not isinstance(body, dict) or any(body.get(f) is None for f in fields):
        return None
    return body


def registry_or_raise(name, signer=None):
    registry = client.get_registry(name, signer=signer)
    if registry is None:
        raise RegistryNotFound(registry=name)
    return registry


@app.route('/', methods=['GET', ])
async def index(request):
    return text('I\'m a teapot', status=418)


@app.route('/registries', methods=['GET'])
async def get_registries(request):
    return json({'registries': client.get_registries()})


# Expects json object such that:
'''
{
    'sender': 'string',
    'name': 'string',
    'title': 'string'
}
'''
@app.route('/registries', methods=['POST'])
async def create_registry(request):
    body = payload(request, 'sender', 'name', 'title')
    if body is None:
        return error('malformed payload', 400)

    client.create(body['name'], body['title'], signer=body['sender'])
    return json({'success': True, 'name': body['name']}, status=201)


@app.route('/registries/<name>', methods=['GET'])
async def get_voting_info(request, name):
    registry = registry_or_raise(name)

    info = registry.get_voting_info()._asdict()
    info['owner'] = registry.owner()

    return json(info)


@app.route('/registries/<name>/candidates', methods=['GET'])
async def get_all_candidates(request, name):
    ids, names, vote_counts = registry_or_raise(name).get_all_candidates()
    return json({'ids': ids, 'names': names, 'vote_counts': vote_counts})


@app.route('/registries/<name>/candidates/<candidate_id:int>', methods=['GET'])
async def get_candidate(request, name, candidate_id):
    return json(registry_or_raise(name).get_candidate(candidate_id)._asdict())


@app.route('/registries/<name>/candidates', methods=['POST'])
async def add_candidate(request, name):
    body = payload(request, 'sender', 'name')
    if body is None:
        return error('malformed payload', 400)

    candidate_id = registry_or_raise(name, signer=body['sender']).add_candidate(body['name'])
    return json({'success': True, 'id': candidate_id}, status=201)


@app.route('/registries/<name>/voters/<address>', methods=['GET'])
async def get_voter(request, name, address):
    return json(registry_or_raise(name).get_voter(address)._asdict())


@app.route('/registries/<name>/voters', methods=['POST'])
async def register_voter(request, name):
    body = payload(request, 'sender', 'address')
    if body is None:
        return error('malformed payload', 400)

    registry_or_raise(name, signer=body['sender']).register_voter(body['address'])
    return json({'success': True}, status=201)


@app.route('/registries/<name>/phase', methods=['POST'])
async def set_voting_phase(request, name):
    body = payload(request, 'sender', 'open')
    if body is None:
        return error('malformed payload', 400)

    registry_or_raise(name, signer=body['sender']).set_voting_phase(body['open'])
    return json({'success': True, 'open': body['open']})


@app.route('/registries/<name>/votes', methods=['POST'])
async def vote(request, name):
    body = payload(request, 'sender', 'candidate_id')
    if body is None:
        return error('malformed payload', 400)

    registry_or_raise(name, signer=body['sender']).vote(body['candidate_id'])
    return json({'success': True}, status=201)


def start_webserver():
    log.info('Serving on port {}'.format(config.WEB_SERVER_PORT))
    app.run(host='0.0.0.0', port=config.WEB_SERVER_PORT, workers=config.NUM_WORKERS, debug=False, access_log=False)


if __name__ == '__main__':
    start_webserver()
