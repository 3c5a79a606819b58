"""
Exceptions.
"""


class EmulatorException(Exception):
    pass


class NodeTableError(EmulatorException):
    pass


class ReservationNotFound(EmulatorException):
    def __init__(self, rsvn_id):
        Exception.__init__(self, "No reservation found with id '%s'" %
                           rsvn_id)
        self.rsvn_id = rsvn_id
