from dissect.cstruct import cstruct

CE_CAB_000_HEADER_SIGNATURE = 0x4543534D  # "MSCE"
CE_CAB_HEADER_SIGNATURE = 0x4643534D      # "MSCF"

TYPE_REG_MASK = 0x00010001
TYPE_REG_DWORD = 0x00010001
TYPE_REG_SZ = 0x00000000
TYPE_REG_MULTI_SZ = 0x00010000
TYPE_REG_BINARY = 0x00000001

LINK_TYPE_DIRECTORY = 0
LINK_TYPE_FILE = 1

cab000_structure = cstruct()
cab000_structure.load("""
    // Fixed 100 byte header at the start of every .000 descriptor
    struct CE_CAB_000_HEADER {
        uint32 AsciiSignature;          // "MSCE"
        uint32 Unknown1;                // usually 0
        uint32 FileLength;              // overall length of the descriptor
        uint32 Unknown2;                // usually 0
        uint32 Unknown3;                // usually 1
        uint32 TargetArchitecture;
        uint32 MinCEVersionMajor;
        uint32 MinCEVersionMinor;
        uint32 MaxCEVersionMajor;
        uint32 MaxCEVersionMinor;
        uint32 MinCEBuildNumber;
        uint32 MaxCEBuildNumber;
        uint16 NumEntriesString;
        uint16 NumEntriesDirs;
        uint16 NumEntriesFiles;
        uint16 NumEntriesRegHives;
        uint16 NumEntriesRegKeys;
        uint16 NumEntriesLinks;
        uint32 OffsetStrings;
        uint32 OffsetDirs;
        uint32 OffsetFiles;
        uint32 OffsetRegHives;
        uint32 OffsetRegKeys;
        uint32 OffsetLinks;
        uint16 OffsetAppname;
        uint16 LengthAppname;           // includes the NUL terminator
        uint16 OffsetProvider;
        uint16 LengthProvider;
        uint16 OffsetUnsupported;
        uint16 LengthUnsupported;       // NUL separated multi string
        uint16 Unknown4;
        uint16 Unknown5;
    };

    // Record prefixes. Each is followed by a variable tail whose length is
    // the last uint16 of the prefix.
    struct CE_CAB_000_STRING_ENTRY {
        uint16 Id;
        uint16 StringLength;            // includes the NUL terminator
    };

    struct CE_CAB_000_DIRECTORY_ENTRY {
        uint16 Id;
        uint16 SpecLength;              // bytes of zero terminated uint16 string ids
    };

    struct CE_CAB_000_FILE_ENTRY {
        uint16 Id;                      // matches the 3 digit extension of the cabinet member
        uint16 DirectoryId;
        uint16 Unknown;                 // usually equal to Id
        uint16 FlagsLower;
        uint16 FlagsUpper;
        uint16 FileNameLength;          // includes the NUL terminator
    };

    struct CE_CAB_000_REGHIVE_ENTRY {
        uint16 Id;
        uint16 HiveRoot;                // 1..4, HKCR HKCU HKLM HKU
        uint16 Unknown;
        uint16 SpecLength;
    };

    struct CE_CAB_000_REGKEY_ENTRY {
        uint16 Id;
        uint16 HiveId;
        uint16 VariableSubstitution;
        uint16 TypeFlagsLower;
        uint16 TypeFlagsUpper;
        uint16 DataLength;              // key name, NUL, value bytes
    };

    struct CE_CAB_000_LINK_ENTRY {
        uint16 Id;
        uint16 Unknown;
        uint16 BaseDirectory;           // 0 is %InstallDir%, 1..17 is %CEn%
        uint16 TargetId;
        uint16 LinkType;                // 0 directory, 1 file
        uint16 SpecLength;
    };
""", compiled=True)

HEADER_SIZE = len(cab000_structure.CE_CAB_000_HEADER)
