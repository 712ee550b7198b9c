from nwpair.core.seq import Seq, Record, SeqError, EmptySequenceError

__all__ = ['Seq', 'Record', 'SeqError', 'EmptySequenceError']
