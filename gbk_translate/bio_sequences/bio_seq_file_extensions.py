GBK_EXTENSIONS = [".gb", ".gbk", ".gbff", ".genbank"]
COMPRESS_EXTENSIONS = [".gz", ".bz2", ".xz"]
