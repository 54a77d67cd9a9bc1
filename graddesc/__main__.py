import sys

from graddesc.train_mnist import main

sys.exit(main())
