from sshpick.components.tui.sshpick_tui import main

main()
