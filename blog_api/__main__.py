from blog_api.cli import main

main()
