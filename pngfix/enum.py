from enum import Flag


class Compliant(Flag):
    '''It indicates which degree of compliantness the data must reflect the format.

    The PNG signature is always enforced; these are the checks that can be
    turned on on top of it.'''
    NONE = 0
    CRC  = 1 << 0
