import os

DB_TYPE = os.getenv('BALLOT_DB_TYPE', 'memory')

MONGO_URL = os.getenv('BALLOT_MONGO_URL', 'mongodb://localhost:27017')
MONGO_DB = os.getenv('BALLOT_MONGO_DB', 'ballotbox')
MONGO_COLLECTION = os.getenv('BALLOT_MONGO_COLLECTION', 'state')
MONGO_TRANSACTIONS = os.getenv('BALLOT_MONGO_TRANSACTIONS', 'false').lower() == 'true'

WEB_SERVER_PORT = int(os.getenv('BALLOT_WEB_PORT', 8080))
NUM_WORKERS = int(os.getenv('BALLOT_WEB_WORKERS', 1))

LOG_DIR = os.getenv('BALLOT_LOG_DIR')

# <registry>.<variable>[:<key>]
DELIMITER = ':'
INDEX_SEPARATOR = '.'

OWNER_KEY = '__owner__'
TIME_KEY = '__submitted__'

TITLE_KEY = 'title'
OPEN_KEY = 'open'
CANDIDATE_COUNT_KEY = 'candidate_count'
TOTAL_VOTES_KEY = 'total_votes'
CANDIDATES_KEY = 'candidates'
VOTERS_KEY = 'voters'

MAX_KEY_SIZE = 1024
MAX_NAME_SIZE = 64
