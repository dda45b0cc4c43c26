
CHUNK_SIZE_HELP_TEXT = (
    "Preferred chunk size when comparing files (e.g. 64K, 1M). Default: 64K\n"
    "The actual chunk may be smaller when many files of one size\n"
    "must be compared and available memory is limited."
)

DIR_FORMAT_HELP_TEXT = (
    "Destination directory format. Default: yyyy/mm\n"
    "  yyyy, yy          : year\n"
    "  mmmm, mmm, mm     : month name, abbreviated name, number\n"
    "  dddd, ddd, dd     : weekday name, abbreviated weekday, day of month\n"
    "  HH, HHT, MM, SS   : hour (24h), hour (12h), minute, second\n"
    "Example: %(prog)s ~/Camera ~/Pictures --dir-fmt yyyy/mm-mmm"
)

EPILOG_TEXT = """
Examples:
  Show which duplicates would be removed, without touching anything
  %(prog)s dedupe --dry-run ~/Pictures

  Remove duplicates across two trees, preferring files from the first one
  %(prog)s dedupe ~/Pictures ~/Downloads/phone-backup

  Move duplicates to the system trash instead of deleting them
  %(prog)s dedupe --trash ~/Pictures

  Move photos into year/month folders based on EXIF dates
  %(prog)s organize ~/Camera ~/Pictures

  Same as above, falling back to file modification time for photos without EXIF data
  %(prog)s organize --use-file-time ~/Camera ~/Pictures
"""
