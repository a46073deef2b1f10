from minimax_music_mcp.main import main

main()
