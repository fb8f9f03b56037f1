"""Register map and option values of the WIT inertial sensor family."""

from enum import IntEnum, IntFlag

REG_SIZE = 0x90

SAVE = 0x00
CALSW = 0x01
RSW = 0x02
RRATE = 0x03
BAUD = 0x04
AXOFFSET = 0x05
AYOFFSET = 0x06
AZOFFSET = 0x07
GXOFFSET = 0x08
GYOFFSET = 0x09
GZOFFSET = 0x0A
HXOFFSET = 0x0B
HYOFFSET = 0x0C
HZOFFSET = 0x0D
D0MODE = 0x0E
D1MODE = 0x0F
D2MODE = 0x10
D3MODE = 0x11
D0PWMH = 0x12
D1PWMH = 0x13
D2PWMH = 0x14
D3PWMH = 0x15
D0PWMT = 0x16
D1PWMT = 0x17
D2PWMT = 0x18
D3PWMT = 0x19
IICADDR = 0x1A
LEDOFF = 0x1B
MAGRANGX = 0x1C
MAGRANGY = 0x1D
MAGRANGZ = 0x1E
BANDWIDTH = 0x1F
GYRORANGE = 0x20
ACCRANGE = 0x21
SLEEP = 0x22
ORIENT = 0x23
AXIS6 = 0x24
FILTK = 0x25
GPSBAUD = 0x26
READADDR = 0x27
BWSCALE = 0x28
MOVETHR = 0x28
MOVESTA = 0x29
ACCFILT = 0x2A
GYROFILT = 0x2B
MAGFILT = 0x2C
POWONSEND = 0x2D
VERSION = 0x2E
CCBW = 0x2F
YYMM = 0x30
DDHH = 0x31
MMSS = 0x32
MS = 0x33
AX = 0x34
AY = 0x35
AZ = 0x36
GX = 0x37
GY = 0x38
GZ = 0x39
HX = 0x3A
HY = 0x3B
HZ = 0x3C
ROLL = 0x3D
PITCH = 0x3E
YAW = 0x3F
TEMP = 0x40

# High precision angle registers
LROLL = 0x3D
HROLL = 0x3E
LPITCH = 0x3F
HPITCH = 0x40
LYAW = 0x41
HYAW = 0x42
TEMP905X = 0x43

D0STATUS = 0x41
D1STATUS = 0x42
D2STATUS = 0x43
D3STATUS = 0x44
PRESSUREL = 0x45
PRESSUREH = 0x46
HEIGHTL = 0x47
HEIGHTH = 0x48
LONL = 0x49
LONH = 0x4A
LATL = 0x4B
LATH = 0x4C
GPSHEIGHT = 0x4D
GPSYAW = 0x4E
GPSVL = 0x4F
GPSVH = 0x50
Q0 = 0x51
Q1 = 0x52
Q2 = 0x53
Q3 = 0x54
SVNUM = 0x55
PDOP = 0x56
HDOP = 0x57
VDOP = 0x58
DELAYT = 0x59
XMIN = 0x5A
XMAX = 0x5B
BATVAL = 0x5C
ALARMPIN = 0x5D
YMIN = 0x5E
YMAX = 0x5F
GYROZSCALE = 0x60
GYROCALITHR = 0x61
ALARMLEVEL = 0x62
GYROCALTIME = 0x63
REFROLL = 0x64
REFPITCH = 0x65
REFYAW = 0x66
GPSTYPE = 0x67
TRIGTIME = 0x68
KEY = 0x69
WERROR = 0x6A
TIMEZONE = 0x6B
CALICNT = 0x6C
WZCNT = 0x6D
WZTIME = 0x6E
WZSTATIC = 0x6F
ACCSENSOR = 0x70
GYROSENSOR = 0x71
MAGSENSOR = 0x72
PRESSENSOR = 0x73
MODDELAY = 0x74

ANGLEAXIS = 0x75
XRSCALE = 0x76
YRSCALE = 0x77
ZRSCALE = 0x78

XREFROLL = 0x79
YREFPITCH = 0x7A
ZREFYAW = 0x7B

ANGXOFFSET = 0x7C
ANGYOFFSET = 0x7D
ANGZOFFSET = 0x7E

NUMBERID1 = 0x7F
NUMBERID2 = 0x80
NUMBERID3 = 0x81
NUMBERID4 = 0x82
NUMBERID5 = 0x83
NUMBERID6 = 0x84

XA85PSCALE = 0x85
XA85NSCALE = 0x86
YA85PSCALE = 0x87
YA85NSCALE = 0x88
XA30PSCALE = 0x89
XA30NSCALE = 0x8A
YA30PSCALE = 0x8B
YA30NSCALE = 0x8C

CHIPIDL = 0x8D
CHIPIDH = 0x8E
REGINITFLAG = REG_SIZE - 1

# AXIS6 values
ALGORITHM9 = 0
ALGORITHM6 = 1

# KEY value
KEY_UNLOCK = 0xB588

# SAVE values
SAVE_PARAM = 0x00
SAVE_SWRST = 0xFF


class CalibrationMode(IntEnum):
    """Values written to the CALSW register."""

    NORMAL = 0x00
    GYRO_ACC = 0x01
    MAG = 0x02
    ALTITUDE = 0x03
    ANGLE_Z = 0x04
    ACC_L = 0x05
    ACC_R = 0x06
    MAG_MM = 0x07
    REF_ANGLE = 0x08
    MAG_2STEP = 0x09
    HEXAHEDRON = 0x12


class OutputHead(IntEnum):
    """Second byte of a normal-protocol output packet."""

    TIME = 0x50
    ACC = 0x51
    GYRO = 0x52
    ANGLE = 0x53
    MAGNETIC = 0x54
    DPORT = 0x55
    PRESS = 0x56
    GPS = 0x57
    VELOCITY = 0x58
    QUATER = 0x59
    GSA = 0x5A
    REGVALUE = 0x5F


class ContentFlag(IntFlag):
    """Bits of the RSW register selecting which packets are sent."""

    TIME = 0x01
    ACC = 0x02
    GYRO = 0x04
    ANGLE = 0x08
    MAG = 0x10
    PORT = 0x20
    PRESS = 0x40
    GPS = 0x80
    V = 0x100
    Q = 0x200
    GSA = 0x400


RSW_MASK = 0xFFF


class OutputRate(IntEnum):
    """Values of the RRATE register."""

    HZ_0_2 = 0x01
    HZ_0_5 = 0x02
    HZ_1 = 0x03
    HZ_2 = 0x04
    HZ_5 = 0x05
    HZ_10 = 0x06
    HZ_20 = 0x07
    HZ_50 = 0x08
    HZ_100 = 0x09
    HZ_125 = 0x0A
    HZ_200 = 0x0B
    ONCE = 0x0C
    NONE = 0x0D


class UartBaud(IntEnum):
    """Indices of serial baud rates for the BAUD register."""

    B4800 = 1
    B9600 = 2
    B19200 = 3
    B38400 = 4
    B57600 = 5
    B115200 = 6
    B230400 = 7
    B460800 = 8
    B921600 = 9


class CanBaud(IntEnum):
    """Indices of CAN bus rates for the BAUD register."""

    B1000000 = 0
    B800000 = 1
    B500000 = 2
    B400000 = 3
    B250000 = 4
    B200000 = 5
    B125000 = 6
    B100000 = 7
    B80000 = 8
    B50000 = 9
    B40000 = 10
    B20000 = 11
    B10000 = 12
    B5000 = 13
    B3000 = 14


class Bandwidth(IntEnum):
    """Values of the BANDWIDTH register."""

    HZ_256 = 0
    HZ_184 = 1
    HZ_94 = 2
    HZ_44 = 3
    HZ_21 = 4
    HZ_10 = 5
    HZ_5 = 6


class Orientation(IntEnum):
    """Values of the ORIENT register."""

    HORIZONTAL = 0
    VERTICAL = 1