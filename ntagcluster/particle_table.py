"""Particle, interaction and NEUT mode lookup tables."""

from __future__ import annotations

import logging
from enum import IntEnum
from types import MappingProxyType

_log = logging.getLogger(__name__)


class G3IntCode(IntEnum):
    """Geant3 interaction codes used for selecting particles."""

    DECAY = 5
    N_CAPTURE = 18


class PDGCode(IntEnum):
    """PDG codes of frequently referenced particles."""

    GAMMA = 22
    PROTON = 2212
    NEUTRON = 2112
    ELECTRON = 11
    MUON = 13


PID_NAMES = MappingProxyType({
    11: "e-", -11: "e+", 12: "nu_e", -12: "anti-nu_e",
    13: "mu-", -13: "mu+", 14: "nu_mu", -14: "anti-nu_mu",
    15: "tau-", -15: "tau+", 16: "nu_tau", -16: "anti-nu_tau",
    22: "gamma", 111: "pi0", 211: "pi-", -211: "pi+",
    130: "K0L", 310: "K0S", 321: "K+", -321: "K-", 221: "eta",
    2112: "n", -2112: "anti-n", 2212: "p", -2212: "anti-p",
    3112: "sigma-", 3122: "lambda", 3212: "sigma0", 3222: "sigma+",
    1000010020: "d", 1000010030: "t", 1000020030: "He3", 1000020040: "alpha",
    1000040080: "8Be", 1000060120: "12C", 1000060130: "13C", 1000060140: "14C",
    1000070130: "13N", 1000070140: "14N", 1000070150: "15N",
    1000080150: "15O", 1000080160: "16O", 1000080170: "17O",
    1000160330: "33S", 1000240540: "54Cr", 1000260570: "57Fe",
    1000280630: "63Ni", 1000320710: "71Ge", 1000320720: "72Ge",
    1000320730: "73Ge", 1000320740: "74Ge", 1000320750: "75Ge",
    1000641560: "156Gd", 1000641570: "157Gd", 1000641580: "158Gd",
    1000832100: "210Bi",
})

PID_MASSES = MappingProxyType({
    1000010020: 1875.613,
    1000010030: 2808.921,
    1000020030: 2809.412,
    1000020040: 3727.379,
    1000080160: 14899.16,
    1000641560: 145240.5,
    1000641580: 147105.4,
    0: 0.0,
})

INTERACTION_NAMES = MappingProxyType({
    0: "-", 5: "Decay", 6: "PairProd", 7: "Compt.", 8: "Photo-e.",
    9: "Brems.", 10: "Delta", 11: "Annihil.", 12: "Hadronic",
    13: "HadElas.", 20: "HadInel.", 18: "nCapture",
})

G3_TO_PDG = MappingProxyType({
    1: 22, 2: -11, 3: 11, 4: 0, 5: -13, 6: 13, 7: 111, 8: 211, 9: -211,
    10: 130, 11: 321, 12: -321, 13: 2112, 14: 2212, 15: -2212, 16: 310,
    17: 221, 18: 3122, 19: 3222, 20: 3212, 21: 3112, 22: 3322, 23: 3312,
    24: 3334, 25: -2112, 26: -2112, 27: -3222, 28: -3212, 29: -3212,
    30: -3322, 31: -3312, 32: -3334,
    45: 1000010020, 46: 1000010030, 47: 1000020040, 48: 0, 50: 0,
    100045: 1000010020, 100046: 1000010030, 100047: 1000020040,
    100048: 0, 100049: 1000020030, 100069: 1000080160,
})

NEUT_MODE_NAMES = MappingProxyType({
    1: "CCQE", -1: "CCQE", 2: "CCQE (+N)", -2: "CCQE (+N)",
    11: "CC1pi (delta)", 12: "CC1pi (delta)", 13: "CC1pi (delta)",
    -11: "CC1pi (delta)", -12: "CC1pi (delta)", -13: "CC1pi (delta)",
    15: "CC1pi (diff)", -15: "CC1pi (diff)",
    16: "CC1pi (coh)", -16: "CC1pi (coh)",
    17: "CC1gamma (delta)", -17: "CC1gamma (delta)",
    18: "CC1K", -18: "CC1K", 19: "CC1K", -19: "CC1K", 20: "CC1K", -20: "CC1K",
    21: "CC multi-pi", -21: "CC multi-Pi",
    22: "CC1eta (delta)", -22: "CC1eta (delta)",
    23: "CC1K (delta)", -23: "CC1K (delta)",
    26: "CCDIS", -26: "CCDIS",
    31: "NC1pi (delta)", 32: "NC1pi (delta)", 33: "NC1pi (delta)", 34: "NC1pi (delta)",
    -31: "NC1pi (delta)", -32: "NC1pi (delta)", -33: "NC1pi (delta)", -34: "NC1pi (delta)",
    36: "NC1pi (coh)", -36: "NC1pi (coh)",
    38: "NC1gamma", -38: "NC1gamma",
    39: "NCpi (coh)", -39: "NCpi (coh)",
    41: "NC multi-pi", -41: "NC multi-pi",
    42: "NC1eta (delta)", -42: "NC1eta (delta)",
    43: "NC1eta (delta)", -43: "NC1eta (delta)",
    44: "NC1K (delta)", -44: "NC1K (delta)",
    45: "NC1K (delta)", -45: "NC1K (delta)",
    46: "NCDIS", -46: "NCDIS",
    51: "NC elastic", 52: "NC elastic", -51: "NC elastic", -52: "NC elastic",
})

# Standard PDG rest masses in MeV, keyed by the absolute PDG code.
_PDG_MASSES = MappingProxyType({
    11: 0.51099895, 12: 0.0, 13: 105.6583755, 14: 0.0,
    15: 1776.86, 16: 0.0, 22: 0.0,
    111: 134.9768, 211: 139.57039, 130: 497.611, 310: 497.611,
    321: 493.677, 221: 547.862,
    2112: 939.56542, 2212: 938.27209,
    3112: 1197.449, 3122: 1115.683, 3212: 1192.642, 3222: 1189.37,
    3312: 1321.71, 3322: 1314.86, 3334: 1672.45,
})


def particle_name(code: int) -> str:
    """Name of a PDG code, or the code itself as text when unknown."""
    return PID_NAMES.get(code, str(code))


def interaction_name(code: int) -> str:
    """Name of a Geant3 interaction code, or the code as text."""
    return INTERACTION_NAMES.get(code, str(code))


def neut_mode_name(code: int) -> str:
    """Name of a NEUT interaction mode, or the code as text."""
    return NEUT_MODE_NAMES.get(code, str(code))


def g3_to_pdg(code: int) -> int:
    """PDG code of a Geant3 (or detector simulation) particle code; 0 if unknown."""
    return G3_TO_PDG.get(code, 0)


def particle_mass(code: int) -> float:
    """Rest mass in MeV of a particle given its PDG code.

    Nuclei not in the table get an approximate mass from their mass number.
    Unknown codes give 0.
    """
    key = abs(code)
    if key in _PDG_MASSES:
        return _PDG_MASSES[key]
    if key in PID_MASSES:
        return PID_MASSES[key]
    if 1_000_000_000 < code < 10_000_000_000:
        return float((code // 10) % 1000 * 931)
    _log.warning("Code %d does not exist in PDG nor ParticleTable, returning 0", code)
    return 0.0