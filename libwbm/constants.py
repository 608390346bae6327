# .wbmani container layout
#   0-1  frame count (u16 BE)
#   2-3  width       (u16 BE)
#   4-5  height      (u16 BE)
#   6-8  color format, 3 ascii chars
#   9..  frames, width*height*3 bytes each, no padding

HEADER_FORMAT = ">HHH3s"
HEADER_SIZE = 9
BYTES_PER_PIXEL = 3

UINT16_MAX = 0xFFFF

FILE_EXTENSION = ".wbmani"

# player runs at ~30fps
FRAME_INTERVAL_MS = 33
PREVIEW_FPS = 30
