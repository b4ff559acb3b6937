class BallotError(Exception):
    """
    The base exception for ballotbox. The fmt directive
    will be overloaded by the inheriting classes

    :ivar msg: The message associated with the error
    """
    fmt = 'An unspecified error occurred'

    def __init__(self, **kwargs):
        msg = self.fmt.format(**kwargs)
        Exception.__init__(self, msg)
        self.kwargs = kwargs


class Unauthorized(BallotError):
    """
    The caller is not the owner of the registry

    :ivar caller: The identity that attempted the call
    :ivar registry: The name of the registry
    """
    fmt = "'{caller}' is not the owner of registry '{registry}'"


class InvalidArgument(BallotError):
    """
    Malformed input, such as an empty candidate name

    :ivar argument: The name of the offending argument
    :ivar reason: What is wrong with it
    """
    fmt = "Invalid argument '{argument}': {reason}"


class AlreadyRegistered(BallotError):
    fmt = "Voter '{address}' is already registered in '{registry}'"


class VotingClosed(BallotError):
    fmt = "Voting is closed in '{registry}'"


class NotRegistered(BallotError):
    fmt = "Voter '{address}' is not registered in '{registry}'"


class AlreadyVoted(BallotError):
    fmt = "Voter '{address}' has already voted in '{registry}'"


class InvalidCandidate(BallotError):
    """
    Candidate id outside of 1..candidate_count

    :ivar candidate_id: The id that was requested
    :ivar candidate_count: The number of candidates at the time of the call
    """
    fmt = "Invalid candidate id {candidate_id!r}, valid ids are 1..{candidate_count}"


class RegistryExists(BallotError):
    """
    When attempting to create a registry, found that it
    already exists in the database

    :ivar registry: The name of the registry submitted.
    """
    fmt = "Registry with name '{registry}' already exists in the database"


class RegistryNotFound(BallotError):
    fmt = "Registry '{registry}' does not exist"


class DatabaseDriverNotFound(BallotError):
    """
    Could not find the specified database driver when
    looking for it

    :ivar driver: The name of the database driver the
                  the user attempted to load
    :ivar known_drivers: The list of known drivers
                         currently supported
    """
    fmt = "Unknown database driver '{driver}', known drivers '{known_drivers}'"
