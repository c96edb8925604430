"""Migration source drivers for directories, file trees, assets, stubs and GitHub."""