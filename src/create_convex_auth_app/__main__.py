from create_convex_auth_app import main

main()
